"""
Analytics Module
================

Dashboard metrics, daily trends, category distribution and stored
daily snapshots, all computed from real inquiry data.
"""
