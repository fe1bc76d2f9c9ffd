"""
Auto Banker - Low balance top-up assistant

Watches the balance of a bank account through the Akahu API and, when it drops
below a configured floor, sends a Home Assistant notification with a one-click
link that moves a fixed top-up amount from a second account.
"""

__version__ = "0.1.0"
__author__ = "Auto Banker Team"
