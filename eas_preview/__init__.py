"""
EAS Update Preview Comments

A CI helper that turns the updates published by an EAS Update run into a
preview comment with QR codes, and posts it on the triggering pull request.
"""

__version__ = "1.0.0"
__author__ = "EAS Preview Team"
