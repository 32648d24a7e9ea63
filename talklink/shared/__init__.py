"""Cross-cutting helpers: request context and logging."""
