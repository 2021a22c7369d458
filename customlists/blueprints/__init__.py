# Blueprints package
