"""Authenticated booking API for shared laundry machines."""
