"""
asroute - AS path summaries for traceroute output.

Reads `traceroute -a` or `lft` output on stdin and prints the name of each
autonomous system the path passes through:
- No-response hops shown as `-> *`
- Reserved/unknown AS markers shown as `-> AS0 (Reserved)`
- Consecutive hops in the same AS collapsed into one lookup
- AS names resolved through Team Cymru whois or RIPEstat
"""

__version__ = "0.1.0"
__author__ = "asroute contributors"
