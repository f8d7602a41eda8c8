"""Asgard data models."""

from asgard.models.entry import DirectoryEntry, DirectoryNode, FileNode
from asgard.models.registry_view import RegistryView
from asgard.models.script_file import ScriptFile

__all__ = [
    "DirectoryEntry",
    "DirectoryNode",
    "FileNode",
    "RegistryView",
    "ScriptFile",
]
