"""
Property listings.

Responsibilities:
- Define the canonical Property schema and its enumerations.
- Load processed listings into memory for the API and the recommender.
- Filter listings by category, price, rooms, area and location.
"""
