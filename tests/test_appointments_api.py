from conftest import DAY

from salon.models import Appointment


def payload(customer, time="10:00", **extra):
    return {"clienteId": customer.id, "fecha": DAY.isoformat(), "hora": time, **extra}


class TestCreateAppointment:
    def test_create(self, client, make_client, make_service):
        customer = make_client()
        service = make_service(name="Corte", base_price=20.0, sale_price=18.0)

        response = client.post("/citas", json=payload(customer, servicioId=service.id))
        assert response.status_code == 201

        data = response.json()
        assert data["estado"] == "PENDIENTE"
        assert data["hora"] == "10:00"
        assert data["fecha"] == DAY.isoformat()
        assert data["servicio"] == "Corte"
        assert data["precio"] == 18.0
        assert data["pagado"] is False
        assert data["cliente"]["nombre"] == "Ana"
        assert data["servicioRef"]["duracionMinutos"] == 30

    def test_accepts_datetime_string(self, client, make_client):
        customer = make_client()
        response = client.post(
            "/citas", json={"clienteId": customer.id, "fecha": f"{DAY.isoformat()}T00:00:00.000Z", "hora": "10:00"}
        )
        assert response.status_code == 201
        assert response.json()["fecha"] == DAY.isoformat()

    def test_free_text_service_without_reference(self, client, make_client):
        response = client.post("/citas", json=payload(make_client(), servicio="  Peinado  ", precio=0))
        data = response.json()
        assert data["servicio"] == "Peinado"
        assert data["servicioId"] is None
        assert data["precio"] is None

    def test_unknown_client(self, client):
        response = client.post("/citas", json={"clienteId": "nadie", "fecha": DAY.isoformat(), "hora": "10:00"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Cliente no encontrado"

    def test_unknown_service(self, client, make_client):
        response = client.post("/citas", json=payload(make_client(), servicioId="no-existe"))
        assert response.status_code == 404
        assert response.json()["detail"] == "Servicio no encontrado"

    def test_invalid_time_is_rejected(self, client, make_client):
        response = client.post("/citas", json=payload(make_client(), time="9:5"))
        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "hora"]
        assert "Hora inválida" in response.json()["detail"][0]["msg"]

    def test_taken_slot_is_conflict(self, client, make_client, make_appointment, db):
        make_appointment(time="10:00", status="CONFIRMADA")

        response = client.post("/citas", json=payload(make_client(), time="10:00"))
        assert response.status_code == 409
        assert response.json()["detail"] == "Ya hay una cita programada para esa fecha y hora"
        assert db.query(Appointment).count() == 1

    def test_spacing_violation_is_conflict(self, client, make_client, make_appointment):
        make_appointment(time="10:00")
        response = client.post("/citas", json=payload(make_client(), time="10:45"))
        assert response.status_code == 409
        assert "30 minutos" in response.json()["detail"]

    def test_done_appointments_do_not_block(self, client, make_client, make_appointment):
        make_appointment(time="10:00", status="REALIZADA")
        response = client.post("/citas", json=payload(make_client(), time="10:00"))
        assert response.status_code == 201

    def test_overlap_can_be_permitted(self, client, make_client, make_appointment):
        make_appointment(time="10:00")
        response = client.post("/citas", json=payload(make_client(), time="10:00", permitirSuperposicion=True))
        assert response.status_code == 201

    def test_cancelled_create_skips_check(self, client, make_client, make_appointment):
        make_appointment(time="10:00")
        response = client.post("/citas", json=payload(make_client(), time="10:00", estado="CANCELADA"))
        assert response.status_code == 201

    def test_rescheduled_create_is_checked(self, client, make_client, make_appointment, db):
        make_appointment(time="10:00")

        response = client.post("/citas", json=payload(make_client(), time="10:00", estado="REAGENDADA"))
        assert response.status_code == 409
        assert db.query(Appointment).count() == 1

        day = client.get("/citas/ocupacion", params={"fecha": DAY.isoformat()}).json()
        assert day["conflictos"] == []


class TestUpdateAppointment:
    def test_mark_done_and_paid(self, client, make_appointment):
        appointment = make_appointment(time="10:00")

        response = client.patch(f"/citas/{appointment.id}", json={"estado": "REALIZADA", "pagado": True})
        assert response.status_code == 200
        assert response.json()["estado"] == "REALIZADA"
        assert response.json()["pagado"] is True

    def test_unchanged_slot_does_not_conflict_with_itself(self, client, make_appointment):
        appointment = make_appointment(time="10:00")
        response = client.patch(f"/citas/{appointment.id}", json={"notas": "Traer referencia"})
        assert response.status_code == 200
        assert response.json()["notas"] == "Traer referencia"

    def test_reschedule_into_taken_slot(self, client, make_appointment):
        make_appointment(time="12:00")
        appointment = make_appointment(time="10:00")

        response = client.patch(f"/citas/{appointment.id}", json={"hora": "12:00"})
        assert response.status_code == 409

    def test_reschedule_to_free_slot(self, client, make_appointment):
        appointment = make_appointment(time="10:00")
        response = client.patch(f"/citas/{appointment.id}", json={"hora": "10:30"})
        assert response.status_code == 200
        assert response.json()["hora"] == "10:30"

    def test_reactivating_into_taken_slot(self, client, make_appointment):
        make_appointment(time="10:00")
        cancelled = make_appointment(time="10:00", status="CANCELADA")

        response = client.patch(f"/citas/{cancelled.id}", json={"estado": "CONFIRMADA"})
        assert response.status_code == 409

    def test_rescheduled_move_into_taken_slot(self, client, make_appointment):
        make_appointment(time="10:00")
        appointment = make_appointment(time="12:00")

        response = client.patch(f"/citas/{appointment.id}", json={"hora": "10:00", "estado": "REAGENDADA"})
        assert response.status_code == 409

        data = client.get("/citas/disponibilidad", params={"fecha": DAY.isoformat(), "hora": "12:00"}).json()
        assert data["disponible"] is False
        assert [c["tipo"] for c in data["conflictos"]] == ["exacto"]

    def test_explicit_null_clears_optional_fields(self, client, make_appointment, make_service):
        service = make_service(name="Mechas", duration_minutes=45)
        appointment = make_appointment(
            time="10:00", service=service, service_label="Mechas", price=40, notes="Rubio"
        )

        response = client.patch(
            f"/citas/{appointment.id}",
            json={"servicioId": None, "servicio": None, "precio": None, "notas": None},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["servicioId"] is None
        assert data["servicioRef"] is None
        assert data["servicio"] is None
        assert data["precio"] is None
        assert data["notas"] is None
        assert data["hora"] == "10:00"

    def test_omitted_fields_are_kept(self, client, make_appointment):
        appointment = make_appointment(time="10:00", price=40, notes="Rubio")

        data = client.patch(f"/citas/{appointment.id}", json={"recordatorio": True}).json()
        assert data["recordatorio"] is True
        assert data["precio"] == 40
        assert data["notas"] == "Rubio"

    def test_null_on_required_field_is_ignored(self, client, make_appointment):
        appointment = make_appointment(time="10:00")
        data = client.patch(f"/citas/{appointment.id}", json={"hora": None, "estado": None}).json()
        assert data["hora"] == "10:00"
        assert data["estado"] == "PENDIENTE"

    def test_unknown_appointment(self, client):
        response = client.patch("/citas/nada", json={"estado": "CONFIRMADA"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Cita no encontrada"


class TestReadAndDelete:
    def test_list_is_ordered_and_filtered(self, client, make_appointment):
        make_appointment(time="12:00")
        make_appointment(time="09:00", status="CONFIRMADA")
        make_appointment(time="10:30")

        data = client.get("/citas").json()
        assert [c["hora"] for c in data["citas"]] == ["09:00", "10:30", "12:00"]
        assert data["pagination"]["total"] == 3

        confirmed = client.get("/citas", params={"estado": "CONFIRMADA"}).json()
        assert [c["hora"] for c in confirmed["citas"]] == ["09:00"]

    def test_get_one(self, client, make_appointment):
        appointment = make_appointment(time="10:00")
        response = client.get(f"/citas/{appointment.id}")
        assert response.status_code == 200
        assert response.json()["id"] == appointment.id

    def test_pending_payment(self, client, make_appointment):
        make_appointment(time="09:00", status="REALIZADA", price=20)
        make_appointment(time="11:00", status="REALIZADA", price=30)
        make_appointment(time="12:00", status="REALIZADA", price=30, paid=True)
        make_appointment(time="13:00", status="CONFIRMADA")

        data = client.get("/citas/pendientes-pago").json()
        assert data["total"] == 2
        assert [c["hora"] for c in data["citas"]] == ["11:00", "09:00"]

    def test_delete(self, client, make_appointment):
        appointment = make_appointment(time="10:00")

        response = client.delete(f"/citas/{appointment.id}")
        assert response.status_code == 200
        assert response.json()["message"] == "Cita eliminada correctamente"
        assert client.get(f"/citas/{appointment.id}").status_code == 404

    def test_deleted_slot_becomes_available(self, client, make_appointment):
        appointment = make_appointment(time="10:00")
        client.delete(f"/citas/{appointment.id}")

        data = client.get("/citas/disponibilidad", params={"fecha": DAY.isoformat(), "hora": "10:00"}).json()
        assert data["disponible"] is True
