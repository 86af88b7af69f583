"""PTT board headers, login records and shared cache layout."""