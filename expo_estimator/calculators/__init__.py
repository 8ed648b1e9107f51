"""
Stall cost engine.

Pure Python arithmetic over the rate table. No I/O.
Given a StallDesignSelection, produce the detailed CostBreakdown and the
simplified per-sqm fabrication rate used for the grand total.
"""
