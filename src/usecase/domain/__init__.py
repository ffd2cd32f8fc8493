"""Domain layer — capability contracts, tags, step descriptors, validation.

Pure logic with no I/O. Must never import from services, commands, or output.
"""
