from pathlib import Path

from bckt_photo import config


def test_load_config_reads_all_sections(tmp_path):
    path = tmp_path / "bckt-photo.yaml"
    path.write_text(
        "posts_dir: content/posts\n"
        "exif_to_tags:\n"
        "  iso: [ISOSpeedRatings, PhotographicSensitivity]\n"
        "  aperture:\n"
        "    - FNumber\n"
        "metadata:\n"
        "  title: '@dir1 - @basename'\n"
        "  tags: ['@dir2', album]\n",
        encoding="utf-8",
    )

    cfg = config.load_config(path, language="de")

    assert cfg.posts_dir == Path("content/posts")
    assert cfg.exif_to_tags == {
        "iso": ["ISOSpeedRatings", "PhotographicSensitivity"],
        "aperture": ["FNumber"],
    }
    assert cfg.title_template == "@dir1 - @basename"
    assert cfg.tag_templates == ["@dir2", "album"]
    assert cfg.language == "de"


def test_missing_config_uses_defaults(tmp_path, caplog):
    cfg = config.load_config(tmp_path / "nope.yaml")

    assert cfg.exif_to_tags == {}
    assert cfg.posts_dir == Path(config.DEFAULT_POSTS_DIR)
    assert cfg.title_template == ""
    assert cfg.tag_templates == []
    assert "not found" in caplog.text


def test_malformed_config_uses_defaults(tmp_path, caplog):
    path = tmp_path / "bad.yaml"
    path.write_text("exif_to_tags: [unclosed\n", encoding="utf-8")

    cfg = config.load_config(path)

    assert cfg.exif_to_tags == {}
    assert "Could not load config" in caplog.text


def test_non_utf8_config_uses_defaults(tmp_path, caplog):
    path = tmp_path / "latin1.yaml"
    path.write_bytes(b"posts_dir: caf\xe9\n")

    cfg = config.load_config(path)

    assert cfg.posts_dir == Path(config.DEFAULT_POSTS_DIR)
    assert "Could not load config" in caplog.text


def test_non_mapping_config_uses_defaults(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    assert config.load_config(path).exif_to_tags == {}


def test_single_string_mapping_entries_are_accepted(tmp_path):
    path = tmp_path / "old.yaml"
    path.write_text("exif_to_tags:\n  camera: Model\n  bad: 42\n  mixed: [LensModel, 7]\n", encoding="utf-8")

    cfg = config.load_config(path)

    assert cfg.exif_to_tags == {"camera": ["Model"], "mixed": ["LensModel"]}


def test_posts_override_wins(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("posts_dir: from-config\n", encoding="utf-8")

    assert config.load_config(path).posts_dir == Path("from-config")
    assert config.load_config(path, posts_override=Path("cli")).posts_dir == Path("cli")
