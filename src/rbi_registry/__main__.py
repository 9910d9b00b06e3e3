"""Entry point for running rbi_registry as a module.

This allows the package to be executed as:
    python -m rbi_registry
"""

from rbi_registry.cli.main import cli

if __name__ == "__main__":
    cli()
