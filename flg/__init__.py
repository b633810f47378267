"""flg -- Clean Architecture scaffolding CLI for Flutter."""

__version__ = "1.1.0"
