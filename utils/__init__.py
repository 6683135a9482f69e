# Shared helpers for the InsightMart backend
