"""
The VIEW layer: Qt node items, the node template registry and the main window.
"""
