"""Routing — ordered route table with first-match-wins lookup.

Routes are registered during setup and frozen into an immutable table
when the app starts serving. Order is significant: the first registered
route that matches a request wins.
"""
