"""
Areas Module

Residential areas with their pickup points (each with its own fare table)
and universities with their colleges.
"""
