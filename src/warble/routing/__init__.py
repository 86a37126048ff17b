"""Routing — ordered route table with first-match dispatch.

Routes are registered during setup and frozen when the app starts
serving; the table is read-only from then on.
"""
