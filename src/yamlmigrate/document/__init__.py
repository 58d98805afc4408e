"""
Document tree and YAML I/O.

The updater reads and mutates Document objects; yaml_io turns YAML text into
documents (attaching comments to their blocks) and back.
"""

from yamlmigrate.document.block import Block, Entry, Section, block_from_value
from yamlmigrate.document.document import Document
from yamlmigrate.document.yaml_io import dumps, load, loads, save

__all__ = [
    "Block",
    "Document",
    "Entry",
    "Section",
    "block_from_value",
    "dumps",
    "load",
    "loads",
    "save",
]
