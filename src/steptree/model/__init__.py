"""
The MODEL layer contains the step tree and its supporting data structures.
It has NO knowledge of the GUI (Qt). Node handles reach it through an
injected factory, so everything here runs headless.
"""
