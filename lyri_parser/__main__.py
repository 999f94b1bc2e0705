"""Package entry point for ``python -m lyri_parser``.

Delegates to the CLI's main() function.
"""

from lyri_parser.cli import main

if __name__ == "__main__":
    main()
