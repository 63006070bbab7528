""" Concoeur: a court of petitions.

The engine is headless. A Court takes inbound events (verdicts, phase
completions, insight requests) and returns outbound signals describing what
happened. concoeur.play drives it from a terminal.
"""
