"""Pharmaceutical inventory application: suppliers, products, batches,
purchase and sales orders, quality control and the stock dashboard."""
