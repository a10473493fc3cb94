"""
Application layer - search engine and the chat assistant built on it.
"""
