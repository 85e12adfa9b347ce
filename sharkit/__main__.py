"""Module entrypoint for ``python -m sharkit``."""

from .cli import main


if __name__ == "__main__":
    main()
