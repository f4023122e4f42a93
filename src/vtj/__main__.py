"""Allow running the job with ``python -m vtj``."""

from vtj.cli import main

if __name__ == "__main__":
    main()
