"""Equipment inspection (vistoria) logging: data model, session state and export."""
