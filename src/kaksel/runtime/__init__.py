"""Process-level services shared by every subcommand."""
