"""
trade_manager
=============

Trade book writer.  Every successfully persisted trade is counted once in
the per-day trade buckets (see `trade_counter`).
"""
