"""Namespace for undo support; it holds no modules at present."""