"""Entry point for ``python -m bitdist``."""

from __future__ import annotations


def main() -> None:
    """Run the bitdist CLI; exits the process with the command's status."""
    from bitdist.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
