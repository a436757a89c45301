"""
Property listings service with favorite-based recommendations.
"""
