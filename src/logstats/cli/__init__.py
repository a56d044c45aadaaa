"""Command line interface for logstats."""
