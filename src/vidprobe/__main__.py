"""Allow running vidprobe with ``python -m vidprobe``."""

from vidprobe.cli import main

if __name__ == "__main__":
    main()
