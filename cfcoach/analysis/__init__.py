"""
Analysis module for CF Coach.

Provides submission statistics, local problem recommendation, practice
insights, and the LLM-backed coaching suggestion pipeline.
"""
