"""Command-line interface: python -m steptree [outline.json]"""
from steptree.main import main

if __name__ == "__main__":
    main()
