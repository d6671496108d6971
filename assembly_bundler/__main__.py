"""Package entry point for ``python -m assembly_bundler``.

Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it; this delegates straight to the CLI.
"""

from assembly_bundler.cli import main

if __name__ == "__main__":
    main()
