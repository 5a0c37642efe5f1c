"""Schema composition engine: controller registry, compiler, multi-variant resolver, merge engine."""
