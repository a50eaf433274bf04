"""
Pydantic models shared by the worklist builder and the archive assembler.
"""
