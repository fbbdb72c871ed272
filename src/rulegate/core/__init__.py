"""
Rule engine core: models, parsing, dispatch, execution and built-in rules.
"""
