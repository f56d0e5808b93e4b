"""
Command line interface for elb-log-parser.
"""
