import base64
import io
import re

import requests

from backend.services.plant_ai import DEFAULT_PLANTS

from conftest import FakeResponse


def _button(html, button_id):
    match = re.search(r'<button[^>]*id="%s"[^>]*>' % button_id, html)
    assert match, f"{button_id} not rendered"
    return match.group(0)


def test_home_shows_default_listing(client, fake_gemini):
    html = client.get('/').get_data(as_text=True)
    assert '热门植物' in html
    for plant in DEFAULT_PLANTS:
        assert plant.name in html
    assert fake_gemini.calls == []


def test_blank_query_shows_default_listing_without_calling(client, fake_gemini):
    html = client.get('/?q=%20%20').get_data(as_text=True)
    assert '热门植物' in html
    assert DEFAULT_PLANTS[0].scientific_name in html
    assert fake_gemini.calls == []


def test_search_renders_results(client, fake_gemini):
    fake_gemini.reply([{"name": "绿萝", "scientificName": "Epipremnum aureum", "shortDescription": "遇水即活。"}])

    html = client.get('/?q=绿萝').get_data(as_text=True)

    assert '搜索结果' in html
    assert '关于 "绿萝" 的植物' in html
    assert '遇水即活。' in html
    assert '清除搜索' in html
    assert 'picsum.photos/seed/绿萝/400/300' in html


def test_search_failure_shows_not_found(client, fake_gemini):
    fake_gemini.fail(requests.ConnectionError("down"))
    html = client.get('/?q=仙人掌').get_data(as_text=True)
    assert '未找到相关植物，请尝试其他关键词。' in html


def test_detail_page(client, fake_gemini, monstera):
    fake_gemini.reply(monstera)

    html = client.get('/plants/龟背竹').get_data(as_text=True)

    assert 'Easy Care' in html
    assert '养护指南' in html
    assert '#观叶' in html
    assert '疏松透气的腐殖土 生长季每月一次液肥' in html


def test_detail_failure_renders_fallback_with_back_action(client, fake_gemini):
    fake_gemini.respond(FakeResponse({"error": "internal"}, status_code=500))

    response = client.get('/plants/不存在的植物')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert '无法获取数据' in html
    assert 'href="/"' in html
    assert client.get('/').status_code == 200


def test_detail_malformed_envelope_renders_fallback(client, fake_gemini):
    fake_gemini.respond(FakeResponse({"candidates": [{"content": None}]}))

    response = client.get('/plants/绿萝')
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert '无法获取数据' in html
    assert 'href="/"' in html


def test_doctor_button_disabled_until_input(client):
    html = client.get('/doctor').get_data(as_text=True)
    assert 'disabled' in _button(html, 'diagnose-button')


def test_doctor_diagnoses_description(client, fake_gemini):
    fake_gemini.reply({"diagnosis": "过度浇水", "solution": "暂停浇水", "prevention": "见干见湿"})

    html = client.post('/doctor', data={'description': '叶子发黄'}).get_data(as_text=True)

    assert '诊断报告' in html
    assert '过度浇水' in html
    assert '叶子发黄' in html
    assert 'disabled' not in _button(html, 'diagnose-button')


def test_doctor_with_nothing_does_not_call(client, fake_gemini):
    html = client.post('/doctor', data={'description': '  '}).get_data(as_text=True)
    assert fake_gemini.calls == []
    assert '诊断报告' not in html


def test_doctor_failure_message(client, fake_gemini):
    fake_gemini.reply("oops")
    html = client.post('/doctor', data={'description': '叶斑'}).get_data(as_text=True)
    assert '诊断失败，请稍后重试。' in html


def test_doctor_uploads_photo(client, fake_gemini, png_bytes):
    fake_gemini.reply({"diagnosis": "叶斑病", "solution": "剪除病叶", "prevention": "通风"})

    html = client.post(
        '/doctor',
        data={'description': '', 'image': (io.BytesIO(png_bytes), 'leaf.png')},
        content_type='multipart/form-data',
    ).get_data(as_text=True)

    assert '叶斑病' in html
    part = fake_gemini.calls[0]['json']['contents'][0]['parts'][0]
    assert base64.b64decode(part['inline_data']['data']) == png_bytes
    assert 'name="image_data"' in html


def test_unsupported_upload_is_ignored(client, fake_gemini):
    html = client.post(
        '/doctor',
        data={'description': '', 'image': (io.BytesIO(b'hello'), 'notes.txt')},
        content_type='multipart/form-data',
    ).get_data(as_text=True)
    assert fake_gemini.calls == []
    assert '请上传 PNG、JPG、GIF 或 WEBP 格式的图片。' in html


def test_identify_button_disabled_until_image(client):
    html = client.get('/identify').get_data(as_text=True)
    assert 'disabled' in _button(html, 'identify-button')


def test_identify_flow(client, fake_gemini, png_bytes):
    fake_gemini.reply({"name": "琴叶榕", "scientificName": "Ficus lyrata", "shortDescription": "叶片如提琴。"})

    html = client.post(
        '/identify',
        data={'image': (io.BytesIO(png_bytes), 'plant.png')},
        content_type='multipart/form-data',
    ).get_data(as_text=True)

    assert '识别结果' in html
    assert '琴叶榕' in html
    assert 'data:image/png;base64,' in html
    assert 'disabled' not in _button(html, 'identify-button')

    response = client.post('/identify/confirm', data={'plant_name': '琴叶榕'})
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/plants/%E7%90%B4%E5%8F%B6%E6%A6%95')


def test_identify_failure_message(client, fake_gemini, png_bytes):
    fake_gemini.fail(requests.ConnectionError("down"))
    html = client.post(
        '/identify',
        data={'image': (io.BytesIO(png_bytes), 'plant.png')},
        content_type='multipart/form-data',
    ).get_data(as_text=True)
    assert '未能识别该植物' in html


def test_confirm_without_name_stays_on_identify(client):
    response = client.post('/identify/confirm', data={'plant_name': ''})
    assert response.headers['Location'].endswith('/identify')


def test_oversized_upload(app, client, png_bytes):
    app.config['MAX_CONTENT_LENGTH'] = 8
    response = client.post(
        '/identify',
        data={'image': (io.BytesIO(png_bytes * 4), 'plant.png')},
        content_type='multipart/form-data',
    )
    assert response.status_code == 413
    assert '图片太大' in response.get_data(as_text=True)
