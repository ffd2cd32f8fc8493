"""Service layer — outcome algebra, precondition gate, step pipeline.

Services may import from the domain layer.
They must never import from commands or output.
"""
