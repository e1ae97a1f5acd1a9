"""Deployment execution, result recording and round scheduling."""
