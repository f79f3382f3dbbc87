"""Shopfront — an e-commerce backend built on Protean.

Catalog, carts, coupons, orders with stock reservation and payment
reconciliation, reviews, wishlists, addresses, notifications and store
settings, all registered with a single ``shopfront`` domain.
"""
