"""Sub-package set aside for JSON Schema helpers; it holds no modules."""