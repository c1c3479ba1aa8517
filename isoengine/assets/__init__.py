"""Loading tile definitions and their PNG frames from disk."""