"""
Mailchimp Tools Package

All tools in this directory are auto-discovered by registry.py
Each tool inherits from MailchimpTool (tools/_common.py) and makes exactly
one Mailchimp API call.
"""

# Tools are auto-discovered, no explicit imports needed
