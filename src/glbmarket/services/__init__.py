"""Services: chain access, metadata aggregation, transactions, assets."""
