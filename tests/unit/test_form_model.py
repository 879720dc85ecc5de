from fundintake.forms.model import FormChange, FormModel


class TestFormModel:
    def test_starts_clean_with_defaults(self) -> None:
        form = FormModel({"fund": "fund_i"})

        assert form.get_values() == {"fund": "fund_i"}
        assert form.is_dirty is False

    def test_set_value_makes_dirty_and_notifies(self) -> None:
        form = FormModel()
        changes: list[FormChange] = []
        form.subscribe(changes.append)

        form.set_value("name", "Acme")

        assert form.is_dirty is True
        assert changes == [FormChange(name="name", value="Acme", user_edit=True)]

    def test_reverting_value_is_clean(self) -> None:
        form = FormModel({"fund": "fund_i"})
        form.set_value("fund", "fund_ii")
        form.set_value("fund", "fund_i")

        assert form.is_dirty is False

    def test_reset_overlays_snapshot_on_defaults(self) -> None:
        form = FormModel({"fund": "fund_i", "status": "active"})
        changes: list[FormChange] = []
        form.subscribe(changes.append)

        form.reset({"name": "Acme", "status": "exited"})

        assert form.get_values() == {"fund": "fund_i", "status": "exited", "name": "Acme"}
        assert form.is_dirty is False
        assert changes[-1].name is None
        assert changes[-1].user_edit is False

    def test_mark_clean(self) -> None:
        form = FormModel()
        form.set_value("name", "Acme")
        form.mark_clean()

        assert form.is_dirty is False

    def test_values_are_copies(self) -> None:
        form = FormModel({"founders": []})
        form.get_values()["founders"].append({"first_name": "Jane"})
        form.get("founders").append({"first_name": "Omar"})

        assert form.get("founders") == []
        assert form.defaults == {"founders": []}

    def test_unsubscribe(self) -> None:
        form = FormModel()
        changes: list[FormChange] = []
        unsubscribe = form.subscribe(changes.append)
        unsubscribe()
        unsubscribe()

        form.set_value("name", "Acme")

        assert changes == []
