"""
Bedrock Addon Generator

Turns loosely-structured (often AI-generated) entity, item and block
definitions into an installable behavior pack + resource pack bundle.
"""
__version__ = "1.0.0"
