"""Project traversal and AI-backed analysis."""
