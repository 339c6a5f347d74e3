"""Query builder module: SQL template validation and filter placeholder substitution."""
