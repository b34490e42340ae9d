"""
Utility wrappers around the Google Sheets Python client.
The goal is to take the pain out of A1 notation: turning the addresses
people type ("Sheet1!B2:C10", "#2!A:D") into the 0-based, half-open
structures the Sheets v4 API actually wants.

Python dataclasses are used for the resource structs and most of the logic is
translating between those and the raw dicts.
"""
