import pytest


@pytest.fixture
def category(client):
    return client.post("/categorias", json={"nombre": "Coloración", "color": "#AA3366"}).json()


def new_service(category, **extra):
    return {"nombre": "Tinte", "categoriaId": category["id"], "precioBase": 35, "duracionMinutos": 60, **extra}


def new_product(category, **extra):
    return {"nombre": "Tinte rubio 8", "categoriaId": category["id"], "precioCosto": 6.5, "precioVenta": 12, **extra}


class TestCategories:
    def test_create_and_list(self, client, category):
        assert category["nombre"] == "Coloración"
        assert [c["nombre"] for c in client.get("/categorias").json()] == ["Coloración"]

    def test_duplicate_name(self, client, category):
        response = client.post("/categorias", json={"nombre": "Coloración"})
        assert response.status_code == 409

    def test_invalid_color(self, client):
        assert client.post("/categorias", json={"nombre": "Uñas", "color": "rojo"}).status_code == 422


class TestServices:
    def test_create(self, client, category):
        response = client.post("/servicios", json=new_service(category))
        assert response.status_code == 201

        data = response.json()
        assert data["duracionMinutos"] == 60
        assert data["categoria"]["nombre"] == "Coloración"
        assert data["activo"] is True

    def test_default_duration(self, client, category):
        data = client.post("/servicios", json=new_service(category, duracionMinutos=30)).json()
        assert data["duracionMinutos"] == 30

    def test_price_must_be_positive(self, client, category):
        assert client.post("/servicios", json=new_service(category, precioBase=0)).status_code == 422

    def test_unknown_category(self, client):
        response = client.post("/servicios", json=new_service({"id": "nada"}))
        assert response.status_code == 404

    def test_duplicate_active_name(self, client, category):
        client.post("/servicios", json=new_service(category))
        response = client.post("/servicios", json=new_service(category))
        assert response.status_code == 409

    def test_name_reusable_after_deactivation(self, client, category):
        service = client.post("/servicios", json=new_service(category)).json()
        client.patch(f"/servicios/{service['id']}", json={"activo": False})

        assert client.post("/servicios", json=new_service(category)).status_code == 201

    def test_list_and_search(self, client, category):
        client.post("/servicios", json=new_service(category))
        client.post("/servicios", json=new_service(category, nombre="Mechas"))

        data = client.get("/servicios", params={"search": "mech"}).json()
        assert [s["nombre"] for s in data["servicios"]] == ["Mechas"]

        by_category = client.get("/servicios", params={"categoriaId": category["id"]}).json()
        assert by_category["pagination"]["total"] == 2

    def test_update_duration_changes_availability(self, client, category, make_appointment, db):
        from salon.models import Service

        service = client.post("/servicios", json=new_service(category, duracionMinutos=30)).json()
        make_appointment(time="10:00", service=db.get(Service, service["id"]))

        params = {"fecha": "2024-03-15", "hora": "10:45"}
        assert client.get("/citas/disponibilidad", params=params).json()["disponible"] is False

        client.patch(f"/servicios/{service['id']}", json={"duracionMinutos": 15})
        # 10:15 end leaves a 30 minute gap
        assert client.get("/citas/disponibilidad", params=params).json()["disponible"] is True

    def test_delete(self, client, category):
        service = client.post("/servicios", json=new_service(category)).json()

        response = client.delete(f"/servicios/{service['id']}")
        assert response.status_code == 200
        assert client.get(f"/servicios/{service['id']}").status_code == 404

    def test_delete_with_appointments(self, client, category, make_appointment, db):
        from salon.models import Service

        service = client.post("/servicios", json=new_service(category)).json()
        make_appointment(service=db.get(Service, service["id"]))

        response = client.delete(f"/servicios/{service['id']}")
        assert response.status_code == 400


class TestProducts:
    def test_create(self, client, category):
        response = client.post("/productos", json=new_product(category, marca=" Wella ", codigo=" 8410 ", stock=12))
        assert response.status_code == 201

        data = response.json()
        assert data["codigo"] == "8410"
        assert data["marca"] == "Wella"
        assert data["stock"] == 12
        assert data["stockMinimo"] == 5
        assert data["stockBajo"] is False
        assert data["unidadMedida"] == "unidad"
        assert data["categoria"]["nombre"] == "Coloración"

    def test_prices_must_be_positive(self, client, category):
        assert client.post("/productos", json=new_product(category, precioCosto=0)).status_code == 422

    def test_unknown_category(self, client):
        response = client.post("/productos", json=new_product({"id": "nada"}))
        assert response.status_code == 404
        assert response.json()["detail"] == "Categoría no encontrada"

    def test_duplicate_active_name(self, client, category):
        client.post("/productos", json=new_product(category))
        response = client.post("/productos", json=new_product(category))
        assert response.status_code == 409
        assert response.json()["detail"] == "Ya existe un producto activo con ese nombre"

    def test_duplicate_active_code(self, client, category):
        client.post("/productos", json=new_product(category, codigo="8410"))
        response = client.post("/productos", json=new_product(category, nombre="Otro tinte", codigo="8410"))
        assert response.status_code == 409
        assert response.json()["detail"] == "Ya existe un producto activo con ese código"

    def test_search_and_low_stock_filter(self, client, category):
        client.post("/productos", json=new_product(category, stock=20))
        client.post("/productos", json=new_product(category, nombre="Champú neutro", marca="Kérastase", stock=2))

        data = client.get("/productos", params={"search": "kéras"}).json()
        assert [p["nombre"] for p in data["productos"]] == ["Champú neutro"]

        low = client.get("/productos", params={"stockBajo": True}).json()
        assert [p["nombre"] for p in low["productos"]] == ["Champú neutro"]
        assert low["productos"][0]["stockBajo"] is True
        assert low["pagination"]["total"] == 1

    def test_update(self, client, category):
        product = client.post("/productos", json=new_product(category, stock=10)).json()

        response = client.patch(f"/productos/{product['id']}", json={"stock": 3, "precioVenta": 14})
        assert response.status_code == 200

        data = response.json()
        assert data["stock"] == 3
        assert data["stockBajo"] is True
        assert data["precioVenta"] == 14
        assert data["nombre"] == "Tinte rubio 8"

    def test_update_to_taken_name(self, client, category):
        client.post("/productos", json=new_product(category))
        other = client.post("/productos", json=new_product(category, nombre="Champú neutro")).json()

        response = client.patch(f"/productos/{other['id']}", json={"nombre": "Tinte rubio 8"})
        assert response.status_code == 409

    def test_delete(self, client, category):
        product = client.post("/productos", json=new_product(category)).json()

        response = client.delete(f"/productos/{product['id']}")
        assert response.status_code == 200
        assert response.json()["message"] == "Producto eliminado exitosamente"

        missing = client.get(f"/productos/{product['id']}")
        assert missing.status_code == 404
        assert missing.json()["detail"] == "Producto no encontrado"
