# flask-restx namespaces, registered on the Api in app.create_app
