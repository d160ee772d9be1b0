"""Redo log dump - decode and print an ib_logfile."""
