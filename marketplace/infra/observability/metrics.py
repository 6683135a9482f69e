from prometheus_client import Counter, Histogram


# Order Metrics
orders_placed_total = Counter("marketplace_orders_placed_total", "Total orders placed", ["status"])
order_value = Histogram(
    "marketplace_order_value",
    "Order value distribution",
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, float("inf")],
)

# Stock Metrics
stock_check_rejections_total = Counter(
    "marketplace_stock_check_rejections_total", "Order lines rejected by the stock check", ["reason"]
)

# Review Metrics
review_mutations_total = Counter("marketplace_review_mutations_total", "Reviews created or deleted", ["action"])

# Analytics Metrics
analytics_duration = Histogram("marketplace_analytics_seconds", "Seller dashboard aggregation time")
