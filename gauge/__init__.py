"""gauge: AI-assisted code quality reports for whole projects."""

__version__ = "0.1.0"
