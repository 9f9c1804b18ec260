"""Command line interface (`reach`)."""
