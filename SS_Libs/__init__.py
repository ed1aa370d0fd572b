"""
SS_Libs - Sculpt Studio Library Modules

This package contains core functionality for the Sculpt Studio project,
organized into specialized sub-packages:

- MaskEditingLib: Brush mask engine (rendering, history, extraction)
- RequestLib: Prompt assembly, model fallback and error classification
- ImageEditingLib: Image loading/saving and the desktop editor window
"""

__version__ = "0.1.0"
