"""Build logging: formatters, context, handlers."""
