"""
Infrastructure layer - corpus loading and the language-model client.
"""
