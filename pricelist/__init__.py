"""
Storefront price-list manager.
"""
