"""Module entrypoint for ``python -m buffersticks``.

All argument parsing and runtime setup happen in ``buffersticks.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
