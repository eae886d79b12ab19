"""Command line interface for blocksettings."""
