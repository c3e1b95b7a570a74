"""Module entrypoint for ``python -m hgstatus``.

Argument parsing and repository lookup happen in ``hgstatus.cli``.
"""

from .cli import run


if __name__ == "__main__":
    run()
