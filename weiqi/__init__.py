"""
Weiqi

Go rules: captures, suicide, simple ko and area scoring.
"""
