"""
Development runner: starts StepTree from a source checkout without installing it.

Usage:
    $ python run.py [outline.json] [--template rounded] [--debug]
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from steptree.main import main

if __name__ == "__main__":
    main()
