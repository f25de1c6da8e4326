"""
Xiangqi

Chinese chess rules, move generation and single-ply AI.
"""
