"""Runtime wiring: settings, logging and dependency construction."""
