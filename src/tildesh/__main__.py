"""Run tildesh with ``python -m tildesh``."""

from tildesh.cli import entrypoint

if __name__ == "__main__":
    entrypoint()
