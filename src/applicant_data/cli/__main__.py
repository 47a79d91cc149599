"""Allow running as: python -m applicant_data.cli"""

from applicant_data.cli import app

if __name__ == "__main__":
    app()
