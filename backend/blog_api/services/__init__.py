"""
Services Module

Business rules that sit between the routers and the models:
- auth: login flow (shared secret, principal lookup, token issuance)
- comments: comment ownership rules on a post's embedded comment list
"""
