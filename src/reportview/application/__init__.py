"""Application layer: component tree, document, store, builder, renderers."""
