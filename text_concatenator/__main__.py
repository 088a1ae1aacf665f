"""
Allows running the tool with `python -m text_concatenator`.
"""

from .cli.main import main

if __name__ == "__main__":
    main()
