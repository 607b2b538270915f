"""Main entry point for repo-clone.

Allows running the tool from a checkout with ``python main.py`` without
installing the console script.
"""

from repo_clone.cli import main

if __name__ == "__main__":
    main()
