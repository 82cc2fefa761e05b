"""
Data layer for SecondHalf.

Includes:
- The Match Record model and form labels (`schema`)
"""
