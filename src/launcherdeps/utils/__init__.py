"""
Utility modules shared across LauncherDeps
"""
