"""
Git-aware bash/zsh prompt with command timing

``prompt-status`` renders a command prompt for Bash and zsh that shows how long
the previous command took and where you are in the current Git repository.

Features:

- Shows the wall-clock duration of the last command, at a precision that
  suits its length (``3ms``, ``1.234s``, ``12.34s``, ``1m15s``, ``1h1m``)
- Shows the current branch, the tag checked out in a detached ``HEAD``, or an
  abbreviated commit id, plus a marker when tracked files have been modified
- Automatically truncates the current directory path if it gets too long
- Never lets a broken or slow Git installation block the prompt
- Supports both Bash and zsh, and prints the hook setup for either with
  ``--init``
- Can optionally output just the Git status or just the duration, in case you
  want to combine them with your own prompt string
"""

__version__ = "0.1.0"
__license__ = "MIT"
