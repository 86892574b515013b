"""
Core modules for LauncherDeps
"""
