"""Entry point for 'python -m minibase' command."""

from minibase.cli import main

if __name__ == "__main__":
    main()
