from cafe.commands import Option, Screen
from cafe.errors import ValidationError


def test_full_customer_session_places_an_order(navigator, db, alice, feed):
    feed(
        "2", "alice", "pw",      # log in
        "3", "1", "Latte", "Bagel", "q", "9",  # order screen: place, back
        "9",                     # log out
        "9",                     # exit
    )
    navigator.start()
    assert db.execute_query_rows("SELECT login, total FROM ORDERS;") == [["alice", "5.5"]]


def test_signup_from_start_screen(navigator, db, feed):
    feed("1", "frank", "pw", "555", "9")
    navigator.start()
    assert db.execute_query_rows("SELECT type FROM USERS WHERE login=?;", ("frank",)) == [["Customer"]]


def test_failed_login_returns_to_start(navigator, feed, capsys):
    feed("2", "alice", "wrong", "9")
    navigator.start()
    assert "invalid login or password" in capsys.readouterr().out


def test_non_numeric_choice_is_asked_again(navigator, alice, feed, capsys):
    feed("menu", "4", "9")
    navigator.menu_screen(alice).run()
    out = capsys.readouterr().out
    assert "your input is invalid" in out
    assert "Latte" in out


def test_customer_does_not_see_manager_options(navigator, alice, manager, capsys):
    navigator.menu_screen(alice).show()
    assert "add/update/delete" not in capsys.readouterr().out
    navigator.menu_screen(manager).show()
    assert "add/update/delete" in capsys.readouterr().out


def test_hidden_options_cannot_be_chosen(navigator, db, alice, feed, capsys):
    navigator.orders.create_order(alice, ["Latte"])
    feed("2", "9")
    navigator.update_order_screen(alice).run()
    assert "unrecognized choice" in capsys.readouterr().out
    assert db.execute_query_rows("SELECT paid FROM ORDERS;") == [["0"]]


def test_staff_marks_paid_through_menu(navigator, db, alice, bob, feed):
    order_id = navigator.orders.create_order(alice, ["Latte"])
    feed("2", str(order_id), "3", str(order_id), "Started", "9")
    navigator.update_order_screen(bob).run()
    assert db.execute_query_rows("SELECT paid FROM ORDERS;") == [["1"]]
    assert db.execute_query_rows("SELECT status FROM ITEMSTATUS;") == [["Started"]]


def test_workflow_errors_return_to_the_screen(navigator, alice, feed, capsys):
    feed("1", "not-a-number", "9")
    navigator.update_order_screen(alice).run()
    assert "invalid order id" in capsys.readouterr().out


def test_manage_menu_runs_one_action_then_returns(navigator, db, manager, feed):
    feed("7", "3", "Bagel", "9")
    navigator.menu_screen(manager).run()
    assert db.execute_query_count("SELECT * FROM MENU WHERE itemName=?;", ("Bagel",)) == 0


def test_manager_reassigns_role_through_profile(navigator, db, manager, alice, feed):
    feed("4", "alice", "4", "Employee", "9", "9")
    navigator.profile_screen(manager).run()
    assert db.execute_query_rows("SELECT type FROM USERS WHERE login=?;", ("alice",)) == [["Employee"]]


def test_end_of_input_leaves_screen(navigator, alice, feed):
    feed()
    navigator.user_screen(alice).run()


def test_option_reports_cafe_errors(capsys):
    def boom():
        raise ValidationError("bad value")

    assert Option(1, "boom", boom).execute() is None
    assert "bad value" in capsys.readouterr().out


def test_leave_option_exits_after_one_run(feed):
    calls = []
    feed("1", "1")
    Screen("once", [Option(1, "go", lambda: calls.append(1), leave=True)]).run()
    assert calls == [1]
