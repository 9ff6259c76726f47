"""Core settings for codemenu."""
