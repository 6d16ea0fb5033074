"""Subcommands of the mip command line tool."""
