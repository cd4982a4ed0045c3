"""Package entry point for ``python -m typst_engine``.

WHY: Users run the converter as ``python -m typst_engine report.qmd``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates to the CLI's main() function.
"""

from typst_engine.cli import main

if __name__ == "__main__":
    main()
