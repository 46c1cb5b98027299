"""
Generators — produce environment descriptor files.

Each generator module exposes a ``generate_*()`` function that returns
``GeneratedFile`` instances; nothing here touches the filesystem.
"""
