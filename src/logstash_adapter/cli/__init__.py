"""
Command-line interface for the Logstash adapter.
"""
