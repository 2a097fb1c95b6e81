from . import order_items, summary

__all__ = [
	"order_items",
	"summary",
]
