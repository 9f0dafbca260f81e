from __future__ import annotations

from services import metrics


def test_render_prometheus_counters():
    metrics.increment_pool_contribution("accepted")
    metrics.increment_pool_contribution("accepted")
    metrics.increment_pool_cycle()

    body = metrics.render_prometheus()
    assert "# TYPE pool_contributions_total counter" in body
    assert 'pool_contributions_total{result="accepted"} 2' in body
    assert "pool_cycles_total 1" in body


def test_metrics_endpoint_reports_pool_activity(client, alice_caller):
    client.post("/v1/pool/contributions", json={"amount_cents": 100}, headers=alice_caller.headers)
    client.post("/v1/pool/contributions", json={"amount_cents": 100}, headers=alice_caller.headers)

    r = client.get("/metrics")
    assert r.status_code == 200, r.text
    assert r.headers["content-type"].startswith("text/plain")
    assert 'pool_contributions_total{result="accepted"} 1' in r.text
    assert 'pool_contributions_total{result="ALREADY_CONTRIBUTED"} 1' in r.text
