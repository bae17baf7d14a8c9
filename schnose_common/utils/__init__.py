"""
Small helpers: timestamp (de)serialization, time formatting, fuzzy scoring, env loading.
"""
