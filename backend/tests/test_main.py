def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_lifespan_sets_up_shared_resources(client):
    state = client.app.state
    assert state.database is not None
    assert state.email_client is not None
