"""
Command line interface for hurlkit.

``hurlkit.cli.runner_app`` holds the ``hurl`` command and
``hurlkit.cli.fmt_app`` the ``hurlfmt`` command. Both are imported lazily by
their console scripts.
"""
