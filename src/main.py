"""Script entrypoint.

Allows `python -m main` from `src/` during development, alongside the
`cardano-tools` console script.
"""

from __future__ import annotations

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
