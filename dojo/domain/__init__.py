"""Academy rules that hold regardless of storage or transport.

Rank taxonomy and ordering, class schedule matching, and roster eligibility
live here so that services and repositories apply one definition of each.
"""
