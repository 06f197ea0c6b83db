"""ClimaSite core: domain model, application handlers and persistence."""
