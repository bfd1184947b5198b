"""
Entry point for the contract analyzer.

    python main.py analyze contract.pdf
    python main.py check
"""

from contract_analyzer.cli.main import cli

if __name__ == "__main__":
    cli()
