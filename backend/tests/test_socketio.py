def _events(sio_client, name):
    return [pkt['args'][0] for pkt in sio_client.get_received() if pkt['name'] == name]


def _seat_two(sio_factory, game_id):
    x = sio_factory()
    o = sio_factory()
    x.emit('joinGame', {'gameId': game_id})
    o.emit('joinGame', {'gameId': game_id})
    x.get_received()
    o.get_received()
    return x, o


def _play(x, o, moves):
    for turn, index in enumerate(moves):
        (x if turn % 2 == 0 else o).emit('makeMove', {'index': index})


def test_join_assigns_x_then_o(sio_factory, new_game):
    game_id = new_game()['id']
    x = sio_factory()
    x.emit('joinGame', {'gameId': game_id})
    received = x.get_received()
    joined = [p['args'][0] for p in received if p['name'] == 'joinedGame']
    assert joined[0]['gameId'] == game_id
    assert joined[0]['symbol'] == 'X'
    assert joined[0]['game']['board'] == [None] * 9
    info = [p['args'][0] for p in received if p['name'] == 'playerInfo']
    assert info[-1] == {'gameId': game_id, 'players': {'X': True, 'O': False}}

    o = sio_factory()
    o.emit('joinGame', {'gameId': game_id})
    assert _events(o, 'joinedGame')[0]['symbol'] == 'O'
    # the first player hears about the second
    assert _events(x, 'playerInfo')[-1]['players'] == {'X': True, 'O': True}


def test_third_join_is_rejected(sio_factory, new_game):
    game_id = new_game()['id']
    _seat_two(sio_factory, game_id)
    third = sio_factory()
    third.emit('joinGame', {'gameId': game_id})
    received = third.get_received()
    assert [p['name'] for p in received] == ['errorMessage']
    assert received[0]['args'][0] == 'Game room is full (already 2 players).'


def test_join_unknown_game(sio_factory):
    sio_client = sio_factory()
    sio_client.emit('joinGame', {'gameId': '42'})
    assert _events(sio_client, 'errorMessage') == ['Game not found']


def test_join_requires_game_id(sio_factory):
    sio_client = sio_factory()
    sio_client.emit('joinGame', {})
    assert _events(sio_client, 'errorMessage') == ['gameId is required']


def test_top_row_win(client, sio_factory, new_game):
    game_id = new_game()['id']
    x, o = _seat_two(sio_factory, game_id)
    _play(x, o, [0, 3, 1, 4, 2])

    final = _events(o, 'gameState')[-1]['game']
    assert final['winner'] == 'X'
    assert final['active'] is False
    assert final['endedAt'] is not None
    assert final['board'] == ['X', 'X', 'X', 'O', 'O', None, None, None, None]

    # terminal is sticky
    o.emit('makeMove', {'index': 5})
    assert _events(o, 'gameState') == []
    assert client.get(f'/api/game/{game_id}').get_json()['game']['board'][5] is None

    games = client.get('/api/recent-games').get_json()['games']
    assert len(games) == 1
    assert games[0]['id'] == game_id
    assert games[0]['winner'] == 'X'
    assert games[0]['totalMoves'] == 5
    assert games[0]['finalBoard'] == 'XXXOO----'


def test_full_board_draw(client, sio_factory, new_game):
    game_id = new_game()['id']
    x, o = _seat_two(sio_factory, game_id)
    _play(x, o, [0, 1, 2, 4, 3, 5, 7, 6, 8])

    final = _events(x, 'gameState')[-1]['game']
    assert final['winner'] == 'draw'
    assert final['active'] is False
    assert None not in final['board']

    games = client.get('/api/recent-games').get_json()['games']
    assert [(g['winner'], g['finalBoard']) for g in games] == [('draw', 'XOXXOOOXX')]


def test_second_player_cannot_move_first(client, sio_factory, new_game):
    game_id = new_game()['id']
    x, o = _seat_two(sio_factory, game_id)
    o.emit('makeMove', {'index': 0})

    assert _events(o, 'errorMessage') == ['Not your turn']
    assert _events(x, 'gameState') == []
    game = client.get(f'/api/game/{game_id}').get_json()['game']
    assert game['board'] == [None] * 9
    assert game['currentPlayer'] == 'X'


def test_illegal_moves_are_dropped_silently(client, sio_factory, new_game):
    game_id = new_game()['id']
    x, o = _seat_two(sio_factory, game_id)
    x.emit('makeMove', {'index': 4})
    x.get_received()
    o.get_received()

    for bad in (4, 9, -1, 'a', 2.0, None):
        o.emit('makeMove', {'index': bad})
    assert o.get_received() == []
    assert x.get_received() == []
    game = client.get(f'/api/game/{game_id}').get_json()['game']
    assert game['board'][4] == 'X'
    assert game['currentPlayer'] == 'O'


def test_unbound_connection_cannot_move(client, sio_factory, new_game):
    game_id = new_game()['id']
    x, _ = _seat_two(sio_factory, game_id)
    stranger = sio_factory()
    stranger.emit('makeMove', {'index': 0})
    assert stranger.get_received() == []
    assert x.get_received() == []
    assert client.get(f'/api/game/{game_id}').get_json()['game']['board'] == [None] * 9


def test_disconnect_frees_seat_and_keeps_board(client, sio_factory, new_game):
    game_id = new_game()['id']
    x, o = _seat_two(sio_factory, game_id)
    x.emit('makeMove', {'index': 0})
    x.get_received()
    o.get_received()

    x.disconnect()
    assert _events(o, 'playerInfo') == [{'gameId': game_id, 'players': {'X': False, 'O': True}}]
    game = client.get(f'/api/game/{game_id}').get_json()['game']
    assert game['board'][0] == 'X'
    assert game['currentPlayer'] == 'O'
    assert game['active'] is True

    # a newcomer takes the vacated seat
    newcomer = sio_factory()
    newcomer.emit('joinGame', {'gameId': game_id})
    assert _events(newcomer, 'joinedGame')[0]['symbol'] == 'X'


def test_join_with_non_object_payload(sio_factory, new_game):
    new_game()
    sio_client = sio_factory()
    sio_client.emit('joinGame', '1')
    assert _events(sio_client, 'errorMessage') == ['gameId is required']
