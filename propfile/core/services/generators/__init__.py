"""
Generators — produce text files from property descriptors.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedFile`` instance.
"""
