"""Memory-mapped files that back a bulletin board's shared cache."""